# ==============================================================================
# RUTAS DE INVENTARIO - /api/sweets
# ==============================================================================
# Lectura y compra: cualquier usuario autenticado.
# Alta, edición, baja y reposición: solo admin.
# ==============================================================================

from flask import Blueprint, jsonify, request

from sweet_shop.access import admin_required, token_required
from sweet_shop.app_container import get_container
from sweet_shop.routes.common import json_body

sweets_bp = Blueprint('sweets', __name__, url_prefix='/api/sweets')


def _inventory():
    return get_container().inventory_service


def _list_response(sweets, message):
    return jsonify({
        'success': True,
        'message': message,
        'data': [s.to_json() for s in sweets],
        'count': len(sweets),
    })


# ═══════════════════════════════════════════════════════════════════════════════
# CONSULTAS (usuario autenticado)
# ═══════════════════════════════════════════════════════════════════════════════

@sweets_bp.route('', methods=['GET'])
@token_required
def list_sweets(identity):
    return _list_response(_inventory().list_sweets(), 'Sweets retrieved successfully')


@sweets_bp.route('/search', methods=['GET'])
@token_required
def search_sweets(identity):
    sweets = _inventory().search(
        name=request.args.get('name'),
        category=request.args.get('category'),
        min_price=request.args.get('minPrice'),
        max_price=request.args.get('maxPrice'),
    )
    return _list_response(sweets, 'Search completed successfully')


@sweets_bp.route('/<sweet_id>', methods=['GET'])
@token_required
def get_sweet(sweet_id, identity):
    sweet = _inventory().get_sweet(sweet_id)
    return jsonify({'success': True, 'data': sweet.to_json()})


# ═══════════════════════════════════════════════════════════════════════════════
# CRUD (solo admin)
# ═══════════════════════════════════════════════════════════════════════════════

@sweets_bp.route('', methods=['POST'])
@admin_required
def create_sweet(identity):
    sweet = _inventory().create_sweet(json_body(), user=identity.email)
    return jsonify({
        'success': True,
        'message': 'Sweet created successfully',
        'data': sweet.to_json(),
    }), 201


@sweets_bp.route('/<sweet_id>', methods=['PUT'])
@admin_required
def update_sweet(sweet_id, identity):
    sweet = _inventory().update_sweet(sweet_id, json_body(), user=identity.email)
    return jsonify({
        'success': True,
        'message': 'Sweet updated successfully',
        'data': sweet.to_json(),
    })


@sweets_bp.route('/<sweet_id>', methods=['DELETE'])
@admin_required
def delete_sweet(sweet_id, identity):
    _inventory().delete_sweet(sweet_id, user=identity.email)
    return jsonify({'success': True, 'message': 'Sweet deleted successfully'})


# ═══════════════════════════════════════════════════════════════════════════════
# STOCK
# ═══════════════════════════════════════════════════════════════════════════════

@sweets_bp.route('/<sweet_id>/purchase', methods=['POST'])
@token_required
def purchase_sweet(sweet_id, identity):
    quantity = json_body().get('quantity')
    sweet = _inventory().purchase(sweet_id, quantity, user=identity.email)
    return jsonify({
        'success': True,
        'message': 'Purchase successful',
        'data': sweet.to_json(),
    })


@sweets_bp.route('/<sweet_id>/restock', methods=['POST'])
@admin_required
def restock_sweet(sweet_id, identity):
    quantity = json_body().get('quantity')
    sweet = _inventory().restock(sweet_id, quantity, user=identity.email)
    return jsonify({
        'success': True,
        'message': 'Restock successful',
        'data': sweet.to_json(),
    })
