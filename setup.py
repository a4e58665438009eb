from setuptools import setup, find_packages

with open('requirements.txt') as f:
    required = [line for line in f.read().splitlines() if line and not line.startswith('#')]

setup(
    name = 'envbind',
    version = '0.1.0',
    description = 'Layered resolution of configuration variables from the OS environment, application config and defaults',
    packages = find_packages(include=['envbind', 'envbind.*']),
    python_requires = '>=3.10',
    install_requires = required,
    extras_require = {
        'test': ['pytest>=7.0', 'pytest-cov'],
    }
)
