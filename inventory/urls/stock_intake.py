from django.urls import path

from inventory import views

app_name = 'stock_intake'

urlpatterns = [
    # JSON API
    path('data/', views.IntakeDataListView.as_view(), name='data'),
    path('data/low-stock/count/', views.LowStockCountView.as_view(), name='low-stock-count'),
    path('data/low-stock/products/', views.LowStockProductsView.as_view(), name='low-stock-products'),
    path('data/<int:pk>/', views.IntakeDataDetailView.as_view(), name='data-detail'),

    # Exports
    path('export/csv/', views.StockIntakeExportCSVView.as_view(), name='export-csv'),
    path('export/pdf/', views.StockIntakeExportPDFView.as_view(), name='export-pdf'),

    # Pages
    path('', views.StockIntakeCollectionView.as_view(), name='list'),
    path('new/', views.StockIntakeNewView.as_view(), name='new'),
    path('<int:pk>/', views.StockIntakeDetailView.as_view(), name='detail'),
    path('<int:pk>/edit/', views.StockIntakeEditView.as_view(), name='edit'),
    path('<int:pk>/update/', views.StockIntakeUpdateView.as_view(), name='update'),
    path('<int:pk>/delete/', views.StockIntakeDeleteView.as_view(), name='delete'),
]
