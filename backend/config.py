import os
from dotenv import load_dotenv

from catalog.services.env_utils import sanitize_env_value, env_int

load_dotenv()


class Config:
    """应用配置"""
    SECRET_KEY = sanitize_env_value(os.getenv('SECRET_KEY'), 'catalog-dev-secret')

    # MongoDB 配置 (URI 必须带数据库名)
    MONGO_URI = sanitize_env_value(os.getenv('MONGO_URI'), 'mongodb://localhost:27017/catalog')
    PRODUCTS_COLLECTION = sanitize_env_value(os.getenv('PRODUCTS_COLLECTION'), 'products')

    # API 配置
    API_PREFIX = '/api/v1'

    # CORS allowlist (comma-separated origins)
    # Example:
    # CORS_ALLOWED_ORIGINS=https://shop.example.com,https://admin.example.com
    CORS_ALLOWED_ORIGINS = [
        origin.strip()
        for origin in os.getenv('CORS_ALLOWED_ORIGINS', '').split(',')
        if origin.strip()
    ]

    # Pagination: pageSize above MAX_PAGE_SIZE is clamped
    DEFAULT_PAGE_SIZE = env_int('DEFAULT_PAGE_SIZE', 10)
    MAX_PAGE_SIZE = env_int('MAX_PAGE_SIZE', 100)

    # Bearer tokens (itsdangerous signed, seconds)
    AUTH_TOKEN_MAX_AGE = env_int('AUTH_TOKEN_MAX_AGE', 86400)
    AUTH_TOKEN_SALT = sanitize_env_value(os.getenv('AUTH_TOKEN_SALT'), 'catalog-auth')

    RATE_LIMIT_PER_MINUTE = env_int('RATE_LIMIT_PER_MINUTE', 100)
    # Number of trusted reverse proxies in front of the app (0 = none)
    PROXY_FIX_X_FOR = env_int('PROXY_FIX_X_FOR', 0)


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    MONGO_URI = 'mongodb://localhost:27017/catalog_test'
    RATE_LIMIT_PER_MINUTE = 1000
    PROXY_FIX_X_FOR = 0
