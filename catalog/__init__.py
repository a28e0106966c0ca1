import os
import logging
from flask import Flask
from dotenv import load_dotenv

from .config import DevConfig, ProdConfig


def create_app(config_name: str | None = None) -> Flask:
    """Application factory with environment based configuration."""
    load_dotenv()

    app = Flask(__name__, instance_relative_config=True)

    # Pick configuration
    env = config_name or os.getenv('ENV') or os.getenv('FLASK_ENV') or 'production'
    cfg_cls = DevConfig if env == 'development' else ProdConfig
    app.config.from_object(cfg_cls)

    # Initialise logging
    logging.basicConfig(level=logging.DEBUG if app.debug else logging.INFO)

    from catalog.products.routes import bp as products_bp
    from catalog.cli import catalog_cli

    app.register_blueprint(products_bp, url_prefix='/products')
    app.cli.add_command(catalog_cli)

    return app
