from django.urls import include, path

urlpatterns = [
    path('', include('htmlclient.urls')),
]
