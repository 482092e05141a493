"""
Setup script para instalação do Portal de Contas.

Este arquivo permite instalar o projeto em modo editable para desenvolvimento:
    pip install -e .[test]

Isso adiciona o projeto ao PYTHONPATH e permite imports como:
    from users.service import UserService
"""

from setuptools import setup, find_packages

setup(
    name="portal-contas",
    version="1.0.0",
    description="Portal de Contas - Gestão de usuários, perfis e autenticação",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["config", "dependencies", "main"],
    package_data={
        "i18n": ["locales/*/*.json"],
        "email_template": ["templates/*.html", "templates/*.txt"],
    },
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "fastapi>=0.110",
        "uvicorn[standard]>=0.27",
        "python-multipart>=0.0.9",
        "sqlalchemy>=2.0",
        "pydantic[email]>=2.5",
        "python-jose[cryptography]>=3.3",
        "bcrypt>=4.0",
        "python-dotenv>=1.0",
        "structlog>=24.1",
        "jinja2>=3.1",
        "aiosmtplib>=3.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
            "httpx>=0.27",
        ],
    },
)
