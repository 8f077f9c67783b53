from django.urls import path
from . import views

urlpatterns = [
    path('catalog/', views.catalog_list, name='catalog-list'),
    path('catalog/<int:catid>/', views.catalog_tree, name='catalog-tree'),
    path('basket/related/', views.basket_related, name='basket-related'),
]
