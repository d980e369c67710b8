from setuptools import setup

setup(
    name="libstack",
    version="0.1",
    packages=["libstack", "libstack.iter"],
    license="",
    description="LAZY SUBARRAY STACK ITERATORS",
    python_requires=">=3.9",
    install_requires=["numpy"],
    extras_require={"test": ["pytest"]},
)
