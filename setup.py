import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name='rulelearn',
    version='0.0',
    packages=setuptools.find_packages(),
    license='BSD',
    description='Dominance-based rough set approach and VC-DomLEM decision '
                'rule induction, with a scikit-learn classifier.',
    long_description=long_description,
    long_description_content_type="text/markdown",
    python_requires='>=3.9',
    install_requires=[
        'scikit_learn >= 1.6',
        'numpy',
        'joblib',
    ],
    extras_require={
        'tests': ['matplotlib', 'pytest >= 3.5'],
    },
)
