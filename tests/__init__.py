import os

# testy nie potrzebują postgresa
os.environ.setdefault("DATABASE_URL", "sqlite://")
