from .base_page import BasePage
from .dashboard_page import DashboardPage
from .login_page import LoginPage
from .product_page import ProductPage

__all__ = ["BasePage", "DashboardPage", "LoginPage", "ProductPage"]
