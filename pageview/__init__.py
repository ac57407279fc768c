# (c) 2005 Ian Bicking and contributors; written for Paste (http://pythonpaste.org)
# Licensed under the MIT license: http://www.opensource.org/licenses/mit-license.php
"""
Helpers for rendering pages under WSGI: views resolved by model type,
captured internal dispatches, and locale-aware value formatting.
"""

__version__ = '0.4'
