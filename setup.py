from setuptools import setup, find_namespace_packages

setup(
    name='datastream-registry',
    version='1.0.0',
    description='Table discovery and schema standardization for Datastream sources',
    packages=find_namespace_packages(include=['datastream_registry*']),
    python_requires='>=3.10',
    install_requires=[
        'google-api-core>=2.11.0',
        'google-auth>=2.23.0',
        'google-cloud-datastream>=1.7.0',
        'google-cloud-logging>=3.5.0',
        'proto-plus>=1.22.3',
        'protobuf>=4.21.6',
        'pydantic>=2.6.3',
        'PyYAML>=6.0.1',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
)
