"""
Pipeline Schemas

Wire models shared between the editor and the pipeline service.
"""
