"""
GA Hull - turns raster ship General Arrangement drawings into classified
vector geometry and DXF documents.
"""

__version__ = "0.1.0"
