"""Pure scheduling rules - no database, no clock, no I/O"""
