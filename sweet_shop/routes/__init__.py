# ==============================================================================
# RUTAS - Blueprints de la API
# ==============================================================================
# Las rutas solo orquestan request → service → response.
# Toda la lógica de negocio vive en services/.
#
# ├── auth.py    → /api/auth   (registro, login)
# └── sweets.py  → /api/sweets (inventario, compras, reposiciones)
# ==============================================================================

from sweet_shop.routes.auth import auth_bp
from sweet_shop.routes.sweets import sweets_bp

__all__ = ['auth_bp', 'sweets_bp']
