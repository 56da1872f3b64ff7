from setuptools import setup, find_packages

from codecs import open
from os import path

here = path.abspath(path.dirname(__file__))

with open(path.join(here, "README.md"), encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="pistor",
    version="1.0",
    description="Declarative artifact recipes for C/C++ projects and their docs.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/lainproliant/pistor",
    author="Lain Musgrove (lainproliant)",
    author_email="lain.proliant@gmail.com",
    license="MIT",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Build Tools",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.8",
    ],
    keywords="build make install docs",
    packages=find_packages(exclude=["examples"]),
    python_requires=">=3.8",
    install_requires=["ansilog", "tree-format"],
    extras_require={},
    package_data={'pistor': []},
    data_files=[],
    entry_points={"console_scripts": ['pistor=pistor.bake:main']},
)
