from django.urls import path

from inventory import views

app_name = 'products'

urlpatterns = [
    # JSON API (before <int:pk> so "data" is never read as an id)
    path('data/', views.ProductDataListView.as_view(), name='data'),
    path('data/total-quantity/', views.ProductTotalQuantityView.as_view(), name='total-quantity'),
    path('data/<int:pk>/', views.ProductDataDetailView.as_view(), name='data-detail'),

    # Exports
    path('export/csv/', views.ProductExportCSVView.as_view(), name='export-csv'),
    path('export/pdf/', views.ProductExportPDFView.as_view(), name='export-pdf'),

    # Pages
    path('', views.ProductCollectionView.as_view(), name='list'),
    path('new/', views.ProductNewView.as_view(), name='new'),
    path('<int:pk>/', views.ProductDetailView.as_view(), name='detail'),
    path('<int:pk>/edit/', views.ProductEditView.as_view(), name='edit'),
    path('<int:pk>/delete/', views.ProductDeleteView.as_view(), name='delete'),
    path('<int:pk>/barcode/', views.ProductBarcodeView.as_view(), name='barcode'),
]
