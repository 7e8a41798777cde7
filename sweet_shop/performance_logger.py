# ==============================================================================
# SISTEMA DE PROFILING INTERNO
# ==============================================================================
# Mide el tiempo de cada petición sin afectar la respuesta.
# Guarda logs legibles en LOG_DIR (performance.log / slow_routes.log).
#
# ACTIVAR/DESACTIVAR: app.config['ENABLE_PROFILING']
# ==============================================================================

import logging
import os
import time

from flask import g, request

# Umbrales de tiempo (en milisegundos)
THRESHOLD_WARNING = 300   # Advertencia si supera 300ms
THRESHOLD_CRITICAL = 700  # Crítico si supera 700ms

PERFORMANCE_LOGGER = 'sweet_shop.performance'
SLOW_ROUTES_LOGGER = 'sweet_shop.slow_routes'

# Mapeo de rutas a nombres legibles (para logs más humanos)
ROUTE_NAMES = {
    # Autenticación
    'POST /api/auth/register': 'Registrar usuario',
    'POST /api/auth/login': 'Iniciar sesión',

    # Inventario
    'GET /api/sweets': 'Listar dulces',
    'GET /api/sweets/search': 'Buscar dulces',
    'GET /api/sweets/<sweet_id>': 'Ver dulce',
    'POST /api/sweets': 'Crear dulce',
    'PUT /api/sweets/<sweet_id>': 'Editar dulce',
    'DELETE /api/sweets/<sweet_id>': 'Eliminar dulce',

    # Stock
    'POST /api/sweets/<sweet_id>/purchase': 'Comprar',
    'POST /api/sweets/<sweet_id>/restock': 'Reponer stock',

    # Sistema
    'GET /health': 'Health check',
}


def get_route_name(method: str, path: str, rule: str = None) -> str:
    """
    Obtiene nombre legible para una ruta.
    Usa la regla de Flask (con parámetros) si la ruta exacta no está mapeada.
    """
    key = f"{method} {path}"
    if key in ROUTE_NAMES:
        return ROUTE_NAMES[key]
    if rule:
        rule_key = f"{method} {rule}"
        if rule_key in ROUTE_NAMES:
            return ROUTE_NAMES[rule_key]
    return key


def _file_logger(name: str, log_dir: str, filename: str) -> logging.Logger:
    """Logger que escribe en LOG_DIR/filename (reemplaza el archivo anterior si cambia)."""
    log = logging.getLogger(name)
    path = os.path.abspath(os.path.join(log_dir, filename))
    for old in list(log.handlers):
        if isinstance(old, logging.FileHandler) and old.baseFilename != path:
            log.removeHandler(old)
            old.close()
    if not any(getattr(h, 'baseFilename', None) == path for h in log.handlers):
        handler = logging.FileHandler(path, encoding='utf-8', delay=True)
        handler.setFormatter(logging.Formatter('%(asctime)s [%(levelname)s] %(message)s'))
        log.addHandler(handler)
    log.setLevel(logging.INFO)
    return log


def init_profiling(app):
    """
    Inicializa el sistema de profiling en una app Flask.
    Registra hooks before_request y after_request.

    Uso:
        from sweet_shop.performance_logger import init_profiling
        init_profiling(app)
    """
    if not app.config.get('ENABLE_PROFILING'):
        return

    log_dir = app.config['LOG_DIR']
    os.makedirs(log_dir, exist_ok=True)
    perf_log = _file_logger(PERFORMANCE_LOGGER, log_dir, 'performance.log')
    slow_log = _file_logger(SLOW_ROUTES_LOGGER, log_dir, 'slow_routes.log')

    @app.before_request
    def _start_timer():
        g.start_time = time.perf_counter()

    @app.after_request
    def _log_request(response):
        start = g.pop('start_time', None)
        if start is None:
            return response

        elapsed = (time.perf_counter() - start) * 1000  # ms
        method = request.method
        path = request.path
        rule = str(request.url_rule) if request.url_rule else path
        action = get_route_name(method, path, rule)

        perf_log.info("%s | %s %s | %d | %.0f ms | %s",
                      action, method, path, response.status_code, elapsed,
                      request.remote_addr or '-')

        if elapsed >= THRESHOLD_CRITICAL:
            slow_log.critical("Ruta MUY LENTA: %s (%s %s) %.0f ms (umbral: %d ms)",
                              action, method, path, elapsed, THRESHOLD_CRITICAL)
        elif elapsed >= THRESHOLD_WARNING:
            slow_log.warning("Ruta LENTA: %s (%s %s) %.0f ms (umbral: %d ms)",
                             action, method, path, elapsed, THRESHOLD_WARNING)

        return response


__all__ = [
    'THRESHOLD_WARNING',
    'THRESHOLD_CRITICAL',
    'ROUTE_NAMES',
    'get_route_name',
    'init_profiling',
]
