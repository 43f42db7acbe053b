# plant_identifier/ui/__init__.py
