"""
Room AC Quote API
Cooling load calculation and tiered equipment quotes for single rooms
"""
