from setuptools import find_packages, setup

setup(
    name="hookrail",
    version="0.1.0",
    description="Priority-ordered filter and action hook registry with config, web and template integration",
    packages=find_packages(include=["hookrail", "hookrail.*"]),
    include_package_data=True,
    package_data={"hookrail": ["templates/*.html"]},
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2",
        "PyYAML",
        "fastapi",
        "jinja2",
        "uvicorn",
    ],
    extras_require={
        "test": ["pytest", "httpx"],
    },
    entry_points={
        "console_scripts": ["hookrail = hookrail.cli:main"],
    },
)
