"""
App-level behaviour: rate limiting, config helpers, CLI.
"""

import os
from unittest import mock

from catalog import RateLimiter, create_app
from catalog.services.env_utils import env_int, sanitize_env_value
from config import TestingConfig

CATEGORIES_URL = '/api/v1/products/categories'


class TestRateLimiter:

    def test_allows_up_to_limit_per_key(self):
        limiter = RateLimiter(requests_per_minute=2)
        assert limiter.is_allowed('1.1.1.1')
        assert limiter.is_allowed('1.1.1.1')
        assert not limiter.is_allowed('1.1.1.1')
        assert limiter.is_allowed('2.2.2.2')

    def test_window_expires(self):
        limiter = RateLimiter(requests_per_minute=1)
        with mock.patch('catalog.time.time', return_value=1000.0):
            assert limiter.is_allowed('ip')
            assert not limiter.is_allowed('ip')
        with mock.patch('catalog.time.time', return_value=1061.0):
            assert limiter.is_allowed('ip')

    def test_stale_keys_are_dropped(self):
        limiter = RateLimiter(requests_per_minute=5)
        with mock.patch('catalog.time.time', return_value=1000.0):
            for i in range(3):
                limiter.is_allowed(f'10.0.0.{i}')
        assert len(limiter.requests) == 3
        with mock.patch('catalog.time.time', return_value=1061.0):
            limiter.is_allowed('10.0.0.9')
        assert list(limiter.requests) == ['10.0.0.9']

    def test_api_returns_429(self):
        class LimitedConfig(TestingConfig):
            RATE_LIMIT_PER_MINUTE = 1

        client = create_app(LimitedConfig).test_client()
        assert client.get(CATEGORIES_URL).status_code == 200
        response = client.get(CATEGORIES_URL)
        assert response.status_code == 429
        assert response.get_json()['error'] == 'TOO_MANY_REQUESTS'
        other = client.get(CATEGORIES_URL, environ_base={'REMOTE_ADDR': '10.1.2.3'})
        assert other.status_code == 200

    def test_forwarded_for_header_cannot_reset_the_limit(self):
        class LimitedConfig(TestingConfig):
            RATE_LIMIT_PER_MINUTE = 1

        client = create_app(LimitedConfig).test_client()
        codes = [
            client.get(CATEGORIES_URL, headers={'X-Forwarded-For': f'1.1.1.{i}'}).status_code
            for i in range(5)
        ]
        assert codes == [200, 429, 429, 429, 429]

    def test_trusted_proxy_hop_identifies_client(self):
        class ProxiedConfig(TestingConfig):
            RATE_LIMIT_PER_MINUTE = 1
            PROXY_FIX_X_FOR = 1

        client = create_app(ProxiedConfig).test_client()
        # ProxyFix trusts only the hop appended by our own proxy (the last one)
        first = client.get(CATEGORIES_URL, headers={'X-Forwarded-For': '6.6.6.6, 9.9.9.9'})
        spoofed = client.get(CATEGORIES_URL, headers={'X-Forwarded-For': '7.7.7.7, 9.9.9.9'})
        other = client.get(CATEGORIES_URL, headers={'X-Forwarded-For': '8.8.8.8'})
        assert [first.status_code, spoofed.status_code, other.status_code] == [200, 429, 200]


class TestEnvUtils:

    def test_strips_quotes_and_escaped_newlines(self):
        assert sanitize_env_value('"secret\\n"') == 'secret'
        assert sanitize_env_value("'mongodb://h/db'") == 'mongodb://h/db'

    def test_fallback_for_missing_or_blank(self):
        assert sanitize_env_value(None, 'products') == 'products'
        assert sanitize_env_value('   ', 'products') == 'products'

    def test_env_int(self):
        with mock.patch.dict(os.environ, {'MAX_PAGE_SIZE': '50'}):
            assert env_int('MAX_PAGE_SIZE', 100) == 50
        with mock.patch.dict(os.environ, {'MAX_PAGE_SIZE': 'lots'}):
            assert env_int('MAX_PAGE_SIZE', 100) == 100
        with mock.patch.dict(os.environ, {'MAX_PAGE_SIZE': '0'}):
            assert env_int('MAX_PAGE_SIZE', 100) == 100


class TestCli:

    def test_init_db_creates_indexes(self, app, collection):
        result = app.test_cli_runner().invoke(args=['init-db'])
        assert result.exit_code == 0
        indexed = {tuple(field for field, _ in spec['key']) for spec in collection.index_information().values()}
        assert ('owner_id', 'created_at') in indexed
        assert ('owner_id', 'category', 'gender') in indexed


def test_run_module_exposes_configured_app():
    import run

    rules = {rule.rule for rule in run.app.url_map.iter_rules()}
    assert '/api/v1/products' in rules
    assert '/api/v1/products/<product_id>' in rules
