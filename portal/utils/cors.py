"""
CORS Configuration
Centralized CORS settings for the application
"""

CORS_CONFIG = {
    "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    "allow_headers": [
        "Content-Type",
        "Authorization",
        "X-Requested-With",
        "Accept",
        "Origin",
    ],
    "supports_credentials": True,
    "max_age": 86400,  # 24 hours
}


def init_cors(app):
    """
    Initialize CORS for the API routes, restricted to the configured frontend
    origin(s) (comma separated).
    """
    from flask_cors import CORS

    origins = [o.strip() for o in app.config['CORS_ORIGINS'].split(',') if o.strip()]
    CORS(app,
         resources={r"/api/*": {"origins": origins}},
         methods=CORS_CONFIG["methods"],
         allow_headers=CORS_CONFIG["allow_headers"],
         supports_credentials=CORS_CONFIG["supports_credentials"],
         max_age=CORS_CONFIG["max_age"])

    app.logger.info("CORS enabled for %s", ", ".join(origins))
