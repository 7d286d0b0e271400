"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for application pages.

Each page class encapsulates:
    - Element locators
    - Page-specific actions built on WebUI keywords

Author: Automation Team
License: MIT
================================================================================
"""

from .dashboard_page import DashboardPage
from .login_page import LoginPage
from .user_register_page import UserRegisterData, UserRegisterPage

__all__ = [
    "DashboardPage",
    "LoginPage",
    "UserRegisterData",
    "UserRegisterPage",
]
