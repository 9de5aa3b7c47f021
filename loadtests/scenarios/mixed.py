"""Mixed storefront workload.

Weights model a storefront where most traffic is browsing, a share of
shoppers buy, and merchandisers occasionally add stock.
"""

from locust import HttpUser, between

from loadtests.scenarios.catalogue import BrowseJourney, CatalogueBuilderJourney
from loadtests.scenarios.shopping import CartChurnJourney, CheckoutJourney


class MixedWorkloadUser(HttpUser):
    wait_time = between(0.5, 3.0)
    tasks = {
        BrowseJourney: 50,
        CartChurnJourney: 20,
        CheckoutJourney: 25,
        CatalogueBuilderJourney: 5,
    }
