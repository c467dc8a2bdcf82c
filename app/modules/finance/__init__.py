"""
Módulo Financiero

Libro de movimientos (ingresos / gastos) y resumen financiero: saldo neto,
ingresos y gastos del mes, deuda de clientes y deuda con proveedores.
"""
