"""
Conexão e inicialização do banco de dados.
"""
