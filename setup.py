from setuptools import find_namespace_packages, setup

setup(
    name="kerfadjust",
    version="0.3.0",
    description="Kerf compensation for laser cutting DXF drawings",
    python_requires=">=3.8",
    packages=find_namespace_packages(include=["kerfadjust", "kerfadjust.*"]),
    install_requires=[
        "numpy",
        "ezdxf>=0.14.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "kerfadjust=kerfadjust.main:main",
        ],
    },
)
