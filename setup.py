__version__ = "0.4"

from setuptools import setup, find_packages

setup(name="pageview",
      version=__version__,
      description="Model-driven views and locale-aware page helpers for WSGI",
      long_description="""\
Helpers for pages rendered under WSGI (`PEP 3333`_).

.. _PEP 3333: https://peps.python.org/pep-3333/

Includes these features...

Views
-----

* Render the view of a model object, found by walking the model's
  classes and probing ``/<prefix>/<module path>/<Class>.<view><postfix>``
  resources, in ``pageview.context`` and ``pageview.resolver``

* Forward and include requests internally, capturing what the target
  writes without touching the outer response, in ``pageview.recursive``

* Serve a directory of resources plus mounted applications, with
  pluggable constructors per file extension (the template engine goes
  here), in ``pageview.resources``

Page helpers
------------

* Typed access to request attributes and parameters

* Locale-aware formatting of numbers, percentages and dates, and
  writing values as text, markup or XML-escaped text

Tools
-----

* Catch HTTP-related exceptions (e.g., ``HTTPNotFound``, or a view that
  cannot be found) and turn them into proper responses in
  ``pageview.httpexceptions``

* A fixture for testing WSGI applications conveniently and in-process,
  in ``pageview.fixture``
""",
      classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Topic :: Internet :: WWW/HTTP",
        "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
        "Topic :: Software Development :: Libraries :: Python Modules",
        ],
      keywords='web application server wsgi views templates',
      license="MIT",
      packages=find_packages(exclude=['tests', 'tests.*']),
      python_requires='>=3.8',
      zip_safe=False,
      install_requires=[
        'PasteDeploy',
        'MarkupSafe',
        'Babel',
        ],
      extras_require={
        'testing': ['pytest'],
        },
      entry_points="""
      [paste.app_factory]
      resources = pageview.resources:make_resource_app

      [paste.filter_app_factory]
      httpexceptions = pageview.httpexceptions:make_middleware
      """,
      )
