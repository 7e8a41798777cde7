"""Sweet Shop API: autenticación, inventario de dulces, compras y reposiciones."""

__version__ = '1.0.0'
