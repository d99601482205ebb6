from dotenv import load_dotenv
import os

load_dotenv()

# Neo4j settings
NEO4J_URI = os.environ.get('NEO4J_URI', 'bolt://localhost:7687')
NEO4J_USER = os.environ.get('NEO4J_USER', 'neo4j')
NEO4J_PASSWORD = os.environ.get('NEO4J_PASSWORD', '')
NEO4J_DATABASE = os.environ.get('NEO4J_DATABASE', 'neo4j')

# Built single-page client, served from "/" when present
CLIENT_DIR = os.environ.get('CLIENT_DIR')

CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get('CORS_ORIGINS', '*').split(',')
    if origin.strip()
]

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
