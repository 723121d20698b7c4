from setuptools import setup

package_name = 'two_point_interpolation'

setup(
    name=package_name,
    version='0.3.0',
    packages=[package_name],
    package_dir={package_name: 'src'},
    python_requires='>=3.10',
    install_requires=['setuptools', 'numpy', 'matplotlib', 'tyro', 'pyyaml'],
    extras_require={
        'test': ['pytest'],
    },
    zip_safe=True,
    description='Minimum-time two-point interpolation with constant acceleration or constant jerk',
    license='MIT',
    tests_require=['pytest'],
    entry_points={
        'console_scripts': [
            'two_point_interpolation = two_point_interpolation.generator_cli:entry_point',
        ],
    },
)
