from setuptools import setup, find_packages

setup(
    name="wall-clock-card",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=['log_config', 'backoff', 'demo_card'],
    package_data={'card': ['locales/*.json']},
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.32.3",
        "pydantic>=2.5.0",
        "python-dotenv>=1.0.1",
    ],
    extras_require={
        "test": [
            "pytest>=8.0.0",
            "responses>=0.25.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "wall-clock-demo=demo_card:main",
        ],
    },
)
