"""Setup script for Maps MCP Server."""

from setuptools import setup, find_packages
import os

# Read the README file
def read_readme():
    readme_path = os.path.join(os.path.dirname(__file__), 'README.md')
    if os.path.exists(readme_path):
        with open(readme_path, 'r', encoding='utf-8') as f:
            return f.read()
    return "Maps MCP Server - Model Context Protocol server for Apple Maps"

setup(
    name='maps-mcp-server',
    version='1.0.0',
    description='MCP (Model Context Protocol) server for Apple Maps automation',
    long_description=read_readme(),
    long_description_content_type='text/markdown',
    author='Maps MCP Server Team',
    author_email='dev@example.com',

    packages=find_packages(exclude=['tests', 'tests.*']),
    py_modules=['mcp_maps_server'],
    python_requires='>=3.11',
    install_requires=[
        'mcp>=1.10.0,<2',
        'pydantic>=2.0.0',
        'click>=8.1.0',
        'python-dotenv>=1.0.0',
    ],

    extras_require={
        'yaml': ['pyyaml>=6.0'],
        'toml': ['tomli>=2.0.0'],
        'dev': [
            'pytest>=7.4.0',
            'pytest-asyncio>=0.21.0',
            'pytest-cov>=4.1.0',
            'pyyaml>=6.0',
            'black>=23.0.0',
            'flake8>=6.0.0',
            'mypy>=1.5.0',
        ],
    },

    entry_points={
        'console_scripts': [
            'maps-mcp-server=maps_mcp_server.cli:cli',
        ],
    },

    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Operating System :: MacOS :: MacOS X',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],

    keywords='apple-maps maps mcp model-context-protocol ai automation applescript',

    include_package_data=True,
    zip_safe=False,
)
