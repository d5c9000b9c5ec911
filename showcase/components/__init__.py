from .footer import FooterComponent
from .header import HeaderComponent

__all__ = ["FooterComponent", "HeaderComponent"]
