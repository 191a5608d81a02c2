"""
BACKEND PACKAGE INITIALIZATION FILE

Đây là file __init__.py của package backend.
HTTP front end cho OTP viewer (Flask): bọc các hàm core thành JSON API nhỏ,
trang web gọi API này mỗi giây một lần.
"""

from .app import app, create_app

__all__ = ['app', 'create_app']
