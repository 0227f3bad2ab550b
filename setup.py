from setuptools import setup, find_packages

setup(
    name="backtest_viewer",
    version="0.1.0",
    packages=find_packages(include=["backtest_viewer", "backtest_viewer.*"]),
    py_modules=["run_viewer"],
    package_data={"backtest_viewer": ["strategies/*.txt"]},
    python_requires=">=3.9",
    install_requires=[
        "pandas",
        "numpy",
        "pyqtgraph",
        "PyQt6",
        "python-dotenv",
        "requests",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "backtest-viewer=run_viewer:main",
        ],
    },
)
