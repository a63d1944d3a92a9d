# module checkout_api.app
import logging

from checkout_api.config import load_settings
from checkout_api.app_setup.factory import create_app

# Configuration lue une seule fois; sans MP_ACCESS_TOKEN l'import échoue et le process s'arrête
settings = load_settings()
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# App globale
app = create_app(settings)
