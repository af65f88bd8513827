from setuptools import setup, find_packages


setup(name='trackvis',
      version='0.1.0',
      description='Visualization of track parameters and their covariance '
                  '(error ellipses and error cones)',
      license='MIT',
      packages=find_packages(include=['trackvis', 'trackvis.*']),
      install_requires=[
          'numpy',
          'scipy',
          'matplotlib',
           ],
      extras_require={
          'polyscope': ['polyscope'],
          'test': ['pytest', 'pytest-cov'],
      },
      entry_points={
          'console_scripts': ['trackvis=trackvis.__main__:main'],
      },
      long_description='None',
      long_description_content_type='text/markdown',
      keywords='visualization tracking covariance',
      classifiers=[
          'Development Status :: 3 - Alpha',
          'Intended Audience :: Science/Research',
          'Intended Audience :: Developers',
          'Topic :: Scientific/Engineering',
          'Topic :: Scientific/Engineering :: Physics',
          'Topic :: Scientific/Engineering :: Visualization',
          'License :: OSI Approved :: MIT License',
          'Programming Language :: Python :: 3.9',
      ],
      zip_safe=False)
