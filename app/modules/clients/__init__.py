"""
Módulo de Clientes

Clientes de la empresa constructora: destinatarios de facturas y origen de la
deuda pendiente que agrega el módulo de Finanzas.
"""
