# Fleet back office: local database models (DATA_BACKEND=sql)
# Import all models here for SQLAlchemy discovery

from app.models.profile import Profile                 # noqa
from app.models.vehicle import Vehicle                 # noqa
from app.models.driver import Driver                   # noqa
from app.models.trip import Trip                       # noqa
from app.models.maintenance_log import MaintenanceLog  # noqa
from app.models.fuel_entry import FuelEntry            # noqa
from app.models.expense import Expense                 # noqa
