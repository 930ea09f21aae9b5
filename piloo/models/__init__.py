# Piloo: Database Models
# Import all models here for SQLAlchemy discovery

from piloo.models.user import User                                # noqa
from piloo.models.camera import Camera                            # noqa
from piloo.models.zone import Zone                                # noqa
from piloo.models.alert import Alert                              # noqa
from piloo.models.employee import Employee                        # noqa
from piloo.models.system_settings import SystemSettings           # noqa
from piloo.models.subscription_plan import SubscriptionPlan       # noqa
from piloo.models.demo_request import DemoRequest                 # noqa
from piloo.models.search_query import SearchQuery                 # noqa
from piloo.models.recording import Recording                      # noqa
