from setuptools import setup, find_packages

package_name = 'wrench_set'

setup(
    name=package_name,
    version='0.1.0',
    packages=find_packages('src'),
    package_dir={'': 'src'},
    scripts=['scripts/analyze_wrench_set.py'],
    install_requires=['setuptools', 'numpy', 'scipy'],
    extras_require={
        'test': ['pytest'],
    },
    python_requires='>=3.10',
    zip_safe=True,
    description='Achievable wrench polytopes and sphere approximations',
    license='MIT',
    tests_require=['pytest'],
)
