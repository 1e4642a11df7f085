#!/usr/bin/env python3
"""
.. automodule:: scoped_env.configuration
.. automodule:: scoped_env.environment
.. automodule:: scoped_env.guard
.. automodule:: scoped_env.os
.. automodule:: scoped_env.unittest
"""
