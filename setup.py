# setup.py
from setuptools import setup, find_packages

setup(
    name="luaconf",
    version="0.1.0",
    description="Lua-like configuration strings: parse to a value tree and stringify back",
    packages=find_packages(include=["luaconf", "luaconf.*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    zip_safe=False,
)
