# ==============================================================================
# RUTAS DE AUTENTICACIÓN - /api/auth
# ==============================================================================

from flask import Blueprint, jsonify

from sweet_shop.app_container import get_container
from sweet_shop.routes.common import json_body

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')


def _auth_response(user, token, status):
    return jsonify({'success': True, 'user': user.to_json(), 'token': token}), status


@auth_bp.route('/register', methods=['POST'])
def register():
    data = json_body()
    user, token = get_container().auth_service.register(
        email=data.get('email'),
        password=data.get('password'),
        name=data.get('name'),
        role=data.get('role'),
    )
    return _auth_response(user, token, 201)


@auth_bp.route('/login', methods=['POST'])
def login():
    data = json_body()
    user, token = get_container().auth_service.login(
        email=data.get('email'),
        password=data.get('password'),
    )
    return _auth_response(user, token, 200)
