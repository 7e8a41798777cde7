# ==============================================================================
# APLICACIÓN FLASK - Sweet Shop API
# ==============================================================================
# create_app() arma la aplicación completa:
#   - Configuración (config.py, variables de entorno / .env)
#   - Extensiones: CORS, JWTManager
#   - Contenedor de dependencias (repositorios + servicios)
#   - Blueprints /api/auth y /api/sweets
#   - Manejo de errores: TODA excepción termina como
#     {"success": false, "message": ...} con su código HTTP
#
# Las rutas NO contienen lógica de negocio: solo request → service → response.
# ==============================================================================

import logging
from typing import Any, Dict

from flask import Flask, jsonify, request
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from werkzeug.exceptions import HTTPException

from sweet_shop.app_container import init_container
from sweet_shop.config import load_config
from sweet_shop.performance_logger import init_profiling
from sweet_shop.routes import auth_bp, sweets_bp
from sweet_shop.services.errors import ShopError


def configure_logging(app: Flask) -> None:
    """Nivel y handler de consola para los loggers del paquete."""
    package_logger = logging.getLogger('sweet_shop')
    package_logger.setLevel(app.config['LOG_LEVEL'])
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        ))
        package_logger.addHandler(handler)


def register_error_handlers(app: Flask) -> None:

    @app.errorhandler(ShopError)
    def handle_shop_error(error: ShopError):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        # 404 de rutas inexistentes, 405, cuerpos demasiado grandes, etc.
        return jsonify({'success': False, 'message': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        app.logger.exception("Error no controlado en %s %s", request.method, request.path)
        return jsonify({'success': False, 'message': 'Internal server error'}), 500


def register_security_headers(app: Flask) -> None:

    @app.after_request
    def set_security_headers(response):
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['Referrer-Policy'] = 'no-referrer-when-downgrade'
        # NOTA: HSTS solo con HTTPS real
        if request.is_secure:
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
        return response


def create_app(overrides: Dict[str, Any] = None) -> Flask:
    """
    Construye la aplicación.

    Args:
        overrides: Configuración con prioridad sobre el entorno
                   (p. ej. {'DATA_DIR': tmp_path} en los tests)
    """
    app = Flask(__name__)
    app.config.update(load_config(overrides))
    app.json.sort_keys = False

    configure_logging(app)

    CORS(app, origins=app.config['CORS_ORIGINS'])
    JWTManager(app)

    # Un contenedor por app: cada app apunta a su propia carpeta de datos
    container = init_container(app)
    app.logger.info("Datos en %s", container.base_path)

    init_profiling(app)
    register_security_headers(app)
    register_error_handlers(app)

    app.register_blueprint(auth_bp)
    app.register_blueprint(sweets_bp)

    @app.route('/health', methods=['GET'])
    def health():
        return jsonify({'status': 'OK', 'message': 'Sweet Shop API is running'})

    return app
