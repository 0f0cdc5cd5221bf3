import re
from flask_cors import CORS
from flask import request, current_app


def setup_cors(app):
    """
    CORS setup for the browser client, driven by app.config['CORS_ORIGINS']
    """
    allowed_origins = origin_patterns(app.config.get('CORS_ORIGINS', []))

    CORS(app,
         resources={r"/api/*": {"origins": allowed_origins}},
         allow_headers=[
             "Accept",
             "Authorization",
             "Cache-Control",
             "Content-Type",
             "Origin",
             "X-Requested-With",
         ],
         methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
         max_age=86400,
         vary_header=True
    )

    @app.after_request
    def after_request(response):
        """Security and cache headers for API responses"""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'

        # lists are re-read after every mutation, never served from cache
        if request.path.startswith('/api/'):
            response.headers['Cache-Control'] = 'no-cache, no-store, must-revalidate'
            response.headers['Pragma'] = 'no-cache'
            response.headers['Expires'] = '0'

        return response


def origin_patterns(allowed_origins):
    """
    Translate wildcard origins such as ``https://*.example.org`` into
    compiled patterns flask-cors can match; plain origins pass through.
    """
    patterns = []
    for origin in allowed_origins:
        if origin != '*' and '*' in origin:
            escaped = re.escape(origin).replace(r'\*', r'([a-z0-9-]+\.)*[a-z0-9-]+')
            patterns.append(re.compile(f'^{escaped}$', re.IGNORECASE))
        else:
            patterns.append(origin)
    return patterns


def log_cors_info(app):
    """
    Log CORS configuration for debugging
    """
    with app.app_context():
        origins = current_app.config.get('CORS_ORIGINS', [])
        current_app.logger.info(f"CORS configured for {len(origins)} origins: {origins}")
