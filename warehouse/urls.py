from django.conf import settings
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    # Role-gated user management API (must precede the admin site)
    path('admin/', include('users.urls')),
    path('site-admin/', admin.site.urls),

    # Inventory pages + JSON API
    path('products/', include('inventory.urls.products')),
    path('stock-intake/', include('inventory.urls.stock_intake')),

    # Auth, dashboard
    path('', include('website.urls')),
]

admin.site.site_header = settings.ADMIN_SITE_HEADER
admin.site.site_title = settings.ADMIN_SITE_TITLE
admin.site.index_title = settings.ADMIN_INDEX_TITLE
