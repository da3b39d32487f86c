from setuptools import setup, find_packages

setup(
    name="rsvp_relay",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.8",
    install_requires=[
        "typer>=0.9.0",
        "rich>=13.6.0",
        "python-dotenv>=1.0.0",
        "requests",
        "flask>=2.2.0",
        "flask-cors>=4.0.0",
        "pyyaml>=6.0",
        "marshmallow>=3.13.0",  # Para validação da submissão (load_default)
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-cov",
        ],
    },
    entry_points={
        "console_scripts": [
            "rsvp-relay=rsvp_relay.cli:main",
        ],
    },
)
