"""
Error taxonomy and the JSON error boundary.

Views and services raise these; ``register_error_handlers`` turns them into
the ``{'success': False, ...}`` envelope. Anything not listed here becomes a
generic 500 and is logged with its traceback, never returned to the caller.
"""

from flask import jsonify
from werkzeug.exceptions import HTTPException


class CatalogError(Exception):
    status_code = 500
    message = 'Server Error'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_dict(self):
        return {'success': False, 'message': self.message}


class ValidationError(CatalogError):
    status_code = 400
    message = 'Validation failed'

    def __init__(self, errors, message=None):
        super().__init__(message)
        self.errors = errors

    def to_dict(self):
        body = super().to_dict()
        body['errors'] = self.errors
        return body


class Unauthorized(CatalogError):
    status_code = 401
    message = 'Unauthorized'


class NotFound(CatalogError):
    status_code = 404
    message = 'Product not found'


def register_error_handlers(app):
    @app.errorhandler(CatalogError)
    def handle_catalog_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return jsonify({
            'success': False,
            'message': error.name
        }), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        app.logger.exception('Unhandled error: %s', error)
        return jsonify({
            'success': False,
            'message': 'Server Error'
        }), 500
