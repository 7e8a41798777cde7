# ==============================================================================
# UTILIDADES COMPARTIDAS POR LOS BLUEPRINTS
# ==============================================================================

from typing import Any, Dict

from flask import request

from sweet_shop.services.errors import ValidationFailed


def json_body() -> Dict[str, Any]:
    """
    Cuerpo JSON de la petición como diccionario.

    Un cuerpo vacío equivale a {}.

    Raises:
        ValidationFailed: JSON mal formado o que no es un objeto
    """
    if not request.get_data(cache=True):
        return {}
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        raise ValidationFailed('Request body must be a JSON object')
    return data
