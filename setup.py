from setuptools import setup, find_packages

# Use find_packages to automatically discover all packages
packages = find_packages(include=["mcdiffusion", "mcdiffusion.*"])

setup(
    name="mc-diffusion",
    version="0.1.0",
    description=(
        "Monte Carlo simulation of choices and reaction times from a "
        "drift-diffusion process with collapsing boundaries"
    ),
    packages=packages,
    package_data={
        "mcdiffusion": ["cli/*.yaml"],
    },
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "numpy",
        "pandas",
        "scipy",
        "tqdm",
        "pyyaml",
        "typer",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "mcdiffusion-simulate=mcdiffusion.cli.generate:app",
        ],
    },
)
