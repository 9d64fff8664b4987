"""cubecli -- command-line scaffolding for Cube.js analytics backends.

Quick usage::

    $ cubecli create hello-world -d postgres
"""

__version__ = "0.1.0"
