"""
Interfaces for printing

Defines the interface implemented by the PDF rendering engines.
"""

from abc import ABC, abstractmethod


class IPdfRenderer(ABC):
    """
    Interface for PDF rendering engines.
    
    Implementations convert HTML to PDF bytes using their specific engine.
    """
    
    @abstractmethod
    def render_html_to_pdf(self, html: str, base_url: str) -> bytes:
        """
        Render HTML to PDF.
        
        Args:
            html: HTML string to render
            base_url: Base URL for resolving relative URLs (images, stylesheets)
            
        Returns:
            PDF content as bytes
            
        Raises:
            Exception: If rendering fails
        """
        pass
