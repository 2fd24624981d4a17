from pathlib import Path

from setuptools import find_packages, setup

# Load packages from requirements.txt
BASE_DIR = Path(__file__).parent
with open(Path(BASE_DIR, "requirements.txt")) as file:
    required_packages = [ln.strip() for ln in file.readlines() if ln.strip()]

# Define our package
setup(
    name="adaptive-quiz",
    version="0.1",
    description="Adaptive quiz engine with threshold-based difficulty progression",
    python_requires=">=3.10",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"adaptive_quiz": ["schemas/*.json", "data/*.json"]},
    install_requires=required_packages,
    extras_require={
        "dev": ["pytest>=7.0", "pre-commit==2.19.0"],
    },
    entry_points={
        "console_scripts": ["adaptive-quiz=adaptive_quiz.run:main"],
    },
)
