# ==============================================================================
# WSGI Entry Point - Para Gunicorn en producción
# ==============================================================================
# USO:
#   gunicorn wsgi:app --bind 0.0.0.0:$PORT
#
# ESTRUCTURA DEL PROYECTO:
#   repo_root/           <- Directorio de trabajo
#   ├── wsgi.py          <- Este archivo
#   ├── pyproject.toml
#   └── sweet_shop/      <- Paquete Python
#       ├── main.py      <- create_app()
#       ├── services/
#       ├── repositories/
#       └── routes/
#
# Para desarrollo local:
#   python wsgi.py
# ==============================================================================

from sweet_shop.main import create_app

app = create_app()

if __name__ == '__main__':
    app.run(debug=not app.config['PRODUCTION_MODE'], host='0.0.0.0', port=app.config['PORT'])
