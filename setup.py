from setuptools import setup, find_packages

setup(
    name="dungeon_solver",
    version="0.1.0",
    description="Grid search and MDP solvers for a small dungeon game",
    zip_safe=False,
    packages=find_packages(include=["dungeon_solver", "dungeon_solver.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "networkx",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
