"""
Configuração global de testes pytest
"""
import sys
import os

# Adiciona o diretório raiz ao PYTHONPATH ANTES de qualquer outra coisa
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, PROJECT_ROOT)

# Configura variáveis de ambiente para testes (antes de importar config.py)
os.environ.setdefault('ENV', 'test')
os.environ.setdefault('DATABASE_URL', 'sqlite:///:memory:')
os.environ.setdefault('SECRET_KEY_JWT', 'test-secret-key')
os.environ.setdefault('EXPIRES_IN_JWT', '15m')
os.environ.setdefault('ADMIN_PASSWORD', 'admin-test-password')
os.environ['SMTP_HOST'] = ''
