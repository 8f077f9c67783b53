from django.apps import AppConfig


class HtmlClientConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'htmlclient'
    
    def ready(self):
        """Register the built-in clients and decorators."""
        import htmlclient.components  # noqa: F401
        import htmlclient.decorators  # noqa: F401
