"""Order status updates — admin only, no transition rules."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.errors import NotFound, Unauthorized
from storefront.ordering.order.order import Order

logger = structlog.get_logger(__name__)

ADMIN_ROLE = "admin"


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    actor_role = String(max_length=20)


@storefront.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        if command.actor_role != ADMIN_ROLE:
            logger.warning("order_status_update_refused", order_id=str(command.order_id), role=command.actor_role)
            raise Unauthorized("Unauthorized")

        repo = current_domain.repository_for(Order)
        try:
            order = repo.get(command.order_id)
        except ObjectNotFoundError:
            raise NotFound("Order not found") from None

        order.update_status(command.status)
        repo.add(order)
        logger.info("order_status_updated", order_id=str(order.id), status=order.status)
