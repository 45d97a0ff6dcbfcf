from setuptools import setup
import os
import re

def read_version():
      """Read the version from the package without importing it, the
      package imports pyang which may not be installed yet."""
      with open(os.path.join('yang2openapi', '__init__.py')) as f:
            mo = re.search(r"^__version__ = '([^']+)'", f.read(), re.M)
      return mo.group(1)


setup(name='yang2openapi',
      version=read_version(),
      description="YANG (RFC 6020/7950) to OpenAPI schema definition compiler",
      long_description="Compiles validated YANG modules to the JSON schema" + \
      " definitions of an OpenAPI document.  Comes with a pyang output" + \
      " plugin.",
      install_requires = ["pyang", "lxml"],
      extras_require = {
            'test': ["pytest"],
            },
      license='BSD',
      classifiers=[
            'Development Status :: 3 - Alpha',
            'License :: OSI Approved :: BSD License',
            'Programming Language :: Python :: 3',
            'Programming Language :: Python :: 3.11',
            ],
      keywords='YANG OpenAPI',
      entry_points={
          'pyang.plugin': [
              'openapi = yang2openapi.plugins.openapi:pyang_plugin_init',
          ]
      },
      python_requires='>=3.11',
      packages=['yang2openapi', 'yang2openapi.plugins'],
      )
