from setuptools import setup

setup(name='attractor',
      version='0.1.0',
      description='Simulation engines for Hopfield associative memories and chip-firing graphs (sandpiles).',
      package_dir={'': 'src'},
      packages=['attractor',
      'attractor.hopfield',
      'attractor.chip_firing'],
      python_requires='>=3.8',
      install_requires=[
      'gymnasium',
      'networkx',
      'numpy',
      'torch>=1.13'],
      extras_require={'test': ['pytest']}
     )
