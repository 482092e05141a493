"""
Internacionalização de mensagens (erros, logs e emails).
"""
