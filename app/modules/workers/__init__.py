"""
Módulo de Obreros (Workers)

Plantilla de obra: oficio, jornal diario, obra asignada y si está activo.
"""
