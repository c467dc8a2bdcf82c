"""
Módulo de Proveedores

Proveedores de materiales: alta, edición, baja y búsqueda por nombre o tipo
de material.
"""
