import os
from setuptools import setup, find_packages

here = os.path.abspath(os.path.dirname(__file__))

with open(os.path.join(here, 'README.rst')) as f:
    README = f.read()

with open(os.path.join(here, 'CHANGES.txt')) as f:
    CHANGES = f.read()

requires = ['requests']

tests_require = requires + ['mock']

setup(name='PyPersonaBus',
      version='0.1.0',
      description='Event bus modules for Mozilla Persona verification',
      long_description=README + '\n\n' + CHANGES,
      license='MPLv2.0',
      classifiers=[
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: Mozilla Public License 2.0 (MPL 2.0)",
        ],
      keywords='authentication persona browserid login email eventbus',
      packages=find_packages(),
      include_package_data=True,
      zip_safe=False,
      python_requires='>=3.4',
      install_requires=requires,
      tests_require=tests_require,
      extras_require={'test': tests_require},
      test_suite="personabus.tests")
