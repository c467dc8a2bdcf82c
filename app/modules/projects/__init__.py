"""
Módulo de Proyectos (obras): presupuesto, gastos y avance.
"""
