"""
Tests Package.

This package contains test suites for the neuroglow animation, covering the
topology builder, the activation simulator, the visual mapping, the render
pass, the lifecycle controller and the drawing backends.
"""

# Tests Package
