"""
Utilitários compartilhados (logging e timezone).
"""
