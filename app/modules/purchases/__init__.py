"""
Módulo de Compras: materiales pedidos a proveedores por obra.
"""
