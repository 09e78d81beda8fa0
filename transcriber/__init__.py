"""
Transcriber Application Factory
"""
from flask import Flask

from config import config

from .extensions import limiter


def create_app(config_name='default'):
    app = Flask(__name__)
    app.config.from_object(config[config_name])
    app.config['ENV_NAME'] = config_name

    from .logging_setup import configure_logging
    from .monitoring import init_sentry
    configure_logging(app)
    init_sentry(app)

    # Initialize extensions
    from .auth import init_auth
    from .services.aws_service import TranscriptionService
    from .services.file_service import ensure_upload_dir

    ensure_upload_dir(app.config['UPLOAD_FOLDER'])
    init_auth(app)
    limiter.init_app(app)
    app.extensions['transcription_service'] = TranscriptionService.from_config(app.config)

    # Register blueprints
    from .api import api_bp
    from .errors import register_error_handlers

    app.register_blueprint(api_bp)
    register_error_handlers(app)

    app.logger.info(
        f"Transcriber {app.config['APP_VERSION']} ready "
        f"(bucket={app.config['AWS_S3_BUCKET']}, max_seconds={app.config['MAX_AUDIO_SECONDS']})"
    )
    return app
