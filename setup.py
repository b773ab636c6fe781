from setuptools import find_packages
from setuptools import setup


setup(
    name="sqstrace",
    version="1.0.0",
    description="Parent trace context extraction for Amazon SQS messages",
    packages=find_packages(exclude=["tests*", "benchmarks*", "scripts*"]),
    package_data={
        "sqstrace": ["py.typed"],
    },
    zip_safe=False,
    python_requires=">=3.8",
    install_requires=[
        "envier~=0.6.1",
        "opentelemetry-api>=1",
    ],
    extras_require={
        "testing": [
            "pytest",
            "mock",
        ],
    },
    entry_points={
        "opentelemetry_propagator": [
            "sqstrace_xray = sqstrace.opentelemetry.propagator:AwsXrayTextMapPropagator",
        ],
    },
)
