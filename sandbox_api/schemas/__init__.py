"""
Sandbox API Schemas - request bodies accepted by the sandbox backend

Response bodies reuse the smartshop domain models so the sandbox speaks
exactly the wire format the client decodes.
"""
