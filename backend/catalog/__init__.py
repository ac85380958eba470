from flask import Flask, request, jsonify
from flask_cors import CORS
from flask_pymongo import PyMongo
from werkzeug.middleware.proxy_fix import ProxyFix
import time
import click

mongo = PyMongo()


# Simple in-memory rate limiter
class RateLimiter:
    """Simple in-memory rate limiter (N requests per minute per IP)"""
    def __init__(self, requests_per_minute=100):
        self.requests_per_minute = requests_per_minute
        self.requests = {}
        self._last_sweep = 0.0

    def _sweep(self, minute_ago):
        """Drop keys with no requests inside the window."""
        for key in list(self.requests):
            recent = [t for t in self.requests[key] if t > minute_ago]
            if recent:
                self.requests[key] = recent
            else:
                del self.requests[key]

    def is_allowed(self, key):
        now = time.time()
        minute_ago = now - 60

        # Clean old entries (all keys at most once a minute)
        if now - self._last_sweep >= 60:
            self._sweep(minute_ago)
            self._last_sweep = now
        recent = [t for t in self.requests.get(key, []) if t > minute_ago]

        # Check if allowed
        if len(recent) >= self.requests_per_minute:
            self.requests[key] = recent
            return False

        # Record this request
        recent.append(now)
        self.requests[key] = recent
        return True


def _register_cli(app):
    @app.cli.command('issue-token')
    @click.argument('user_id')
    def issue_token_command(user_id):
        """Print a bearer token for USER_ID."""
        from catalog.services.auth import issue_token
        click.echo(issue_token(user_id))

    @app.cli.command('init-db')
    def init_db_command():
        """Create the products collection indexes."""
        from catalog.services.product_repository import ProductRepository
        for name in ProductRepository.ensure_indexes():
            click.echo(f'✓ index {name}')


def create_app(config_object=None):
    """创建 Flask 应用"""
    if config_object is None:
        from config import Config
        config_object = Config

    app = Flask(__name__)
    app.config.from_object(config_object)

    # CORS: use explicit allowlist in production when provided.
    cors_origins = app.config.get('CORS_ALLOWED_ORIGINS', [])
    if cors_origins:
        CORS(app, resources={r"/api/*": {"origins": cors_origins}})
    else:
        CORS(app, resources={r"/api/*": {"origins": "*"}})

    # 初始化 MongoDB
    mongo.init_app(app)

    # Behind N trusted proxies, ProxyFix rewrites remote_addr from X-Forwarded-For
    proxy_hops = app.config.get('PROXY_FIX_X_FOR', 0)
    if proxy_hops:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=proxy_hops)

    rate_limiter = RateLimiter(requests_per_minute=app.config.get('RATE_LIMIT_PER_MINUTE', 100))

    # Rate limiting middleware
    @app.before_request
    def check_rate_limit():
        if request.path.startswith('/api/'):
            if not rate_limiter.is_allowed(request.remote_addr):
                return jsonify({
                    'success': False,
                    'message': 'Rate limit exceeded. Please wait a moment.',
                    'error': 'TOO_MANY_REQUESTS'
                }), 429

    from catalog.errors import register_error_handlers
    register_error_handlers(app)

    # 注册蓝图
    from catalog.routes.products import products_bp

    api_prefix = app.config.get('API_PREFIX', '/api/v1')
    app.register_blueprint(products_bp, url_prefix=f'{api_prefix}/products')

    _register_cli(app)

    app.logger.info('Catalog API ready (collection=%s)', app.config.get('PRODUCTS_COLLECTION', 'products'))
    return app
