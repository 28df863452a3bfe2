import setuptools

with open("README.rst", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="asfem",
    version="0.1.0",
    author="Yang Bai",
    description="Nonlinear finite element solver layer on top of PETSc SNES",
    long_description=long_description,
    long_description_content_type="text/x-rst",
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Topic :: Scientific/Engineering",
        "Topic :: Scientific/Engineering :: Mathematics",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3 :: Only",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Operating System :: OS Independent",
    ],
    keywords="finite elements, nonlinear solvers, PETSc, SNES",
    install_requires=[
        "numpy>=1.21",
        "petsc4py",
        "scipy",
        "typing_extensions",
    ],
    extras_require={"tests": ["pytest"]},
    python_requires=">=3.9",
)
