"""Mixed storefront workload scenario.

Combines shopper, checkout and back-office journeys with weights that
model realistic shop traffic. This is the recommended scenario for load
baseline testing.
"""

from locust import HttpUser, between

from loadtests.scenarios.admin import CatalogueManagementJourney, OrderFulfilmentJourney
from loadtests.scenarios.checkout import AbandonedCheckoutJourney, PaidCheckoutJourney
from loadtests.scenarios.shopper import BrowsingJourney, ShopperPurchaseJourney


class MixedWorkloadUser(HttpUser):
    """Realistic mixed workload simulating concurrent shop activity.

    Browsing (50%): anonymous catalogue traffic, the bulk of real visits.

    Buying (40%):
    - Hosted checkout paid through the provider webhook
    - Direct orders from a signed-in shopper's cart
    - Abandoned checkouts that expire

    Back office (10%): restocking keeps the catalogue purchasable while
    fulfilment moves paid orders along.
    """

    wait_time = between(0.5, 3.0)
    tasks = {
        BrowsingJourney: 50,
        PaidCheckoutJourney: 20,
        ShopperPurchaseJourney: 12,
        AbandonedCheckoutJourney: 8,
        CatalogueManagementJourney: 4,
        OrderFulfilmentJourney: 6,
    }
