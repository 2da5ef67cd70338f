#!/usr/bin/env python3
"""
Setup script for eboot-dlc-patcher that reads its metadata from pyproject.toml.
"""

import sys

from setuptools import find_namespace_packages, setup

# Read the pyproject.toml to get the package metadata
try:
    import tomllib

    with open("pyproject.toml", "rb") as f:
        pyproject_data = tomllib.load(f)

    poetry = pyproject_data["tool"]["poetry"]
    name = poetry["name"]
    version = poetry["version"]
    description = poetry["description"]
    authors = poetry["authors"]
    license_text = poetry["license"]

    # Get dependencies; optional ones belong to extras
    dependencies = poetry["dependencies"]
    install_requires = []
    optional = {}
    for dep, version_spec in dependencies.items():
        if dep == "python":
            continue
        if isinstance(version_spec, str):
            install_requires.append(f"{dep}{version_spec}")
        elif version_spec.get("optional"):
            optional[dep] = f"{dep}{version_spec.get('version', '')}"
        else:
            install_requires.append(f"{dep}{version_spec.get('version', '')}")
    extras_require = {
        extra: [optional[dep] for dep in deps if dep in optional]
        for extra, deps in poetry.get("extras", {}).items()
    }

    # Get packages (lib/core and lib/_util are namespace packages)
    packages = find_namespace_packages(where="src", include=["eboot_dlc_patcher*"])
    package_dir = {"": "src"}

    setup(
        name=name,
        version=version,
        description=description,
        author=authors[0] if isinstance(authors, list) else authors,
        license=license_text,
        packages=packages,
        package_dir=package_dir,
        install_requires=install_requires,
        extras_require=extras_require,
        entry_points={
            "console_scripts": [f"{k}={v}" for k, v in poetry.get("scripts", {}).items()]
        },
        python_requires=">=3.11,<4.0",
        include_package_data=True,
        zip_safe=False,
    )

except Exception as e:
    print(f"Error reading pyproject.toml: {e}")
    sys.exit(1)
