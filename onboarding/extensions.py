"""Flask extension instances shared across the application."""
from flask_jwt_extended import JWTManager

jwt = JWTManager()
