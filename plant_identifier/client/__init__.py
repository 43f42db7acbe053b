# plant_identifier/client/__init__.py
