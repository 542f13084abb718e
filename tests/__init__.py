from pathlib import Path
import sys

# Paquetes planos en la raíz: importables aunque no se instale el proyecto
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))
