from setuptools import setup


setup(
    name="listing-doctor",
    version="0.3.0",
    description="Smart parsing of Polish real-estate price lists (CSV and Excel) into validated listing records",
    packages=["listing_doctor"],
    python_requires=">=3.9",
    install_requires=[
        "pandas",
        "chardet",
        "openpyxl",
        "rapidfuzz",
    ],
    extras_require={
        "excel-legacy": ["xlrd"],
        "test": ["pytest"],
        "all": ["xlrd"],
    },
    entry_points={
        "console_scripts": [
            "listing-doctor=listing_doctor.cli:main",
        ]
    },
)
