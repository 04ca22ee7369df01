# pytest configuration to add project root to Python path
import sys
from pathlib import Path

# Add project root to sys.path so docket/docket_cli import without installation
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))
