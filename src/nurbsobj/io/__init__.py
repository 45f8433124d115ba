"""
The IO layer translates entities to and from Wavefront OBJ freeform text.
It owns scanning, directive parsing, index resolution and re-emission.
"""
