"""
Example: Protected events, group batching and dispatch strategies

Shows how protected events survive off(), how group handlers attach to many
events at once, and how the three dispatch strategies combine results.
"""

import asyncio
import logging

from eventchannel import (
    configure_logging,
    create_channel,
    emit_group_async,
    emit_group_with_strategy,
    off_group,
    on_group,
    register_protected_event,
    unregister_protected_event,
)

configure_logging(logging.INFO)


async def main():
    channel = create_channel()

    # Example 1: Protected events
    print("=" * 60)
    print("Example 1: Protected Events")
    print("=" * 60)

    session_expired = register_protected_event("session-expired", {
        "description": "User session timed out",
        "group": "auth",
    })

    channel.on(session_expired, lambda user: print(f"Session expired for {user}"))
    channel.off(session_expired)            # ignored, the event is protected
    channel.emit(session_expired, "alice")

    unregister_protected_event(session_expired)
    channel.off(session_expired)            # now actually removes the listener
    channel.emit(session_expired, "bob")    # nothing printed

    print()

    # Example 2: Group handlers
    print("=" * 60)
    print("Example 2: Group Handlers")
    print("=" * 60)

    created = register_protected_event("created", {"group": "order", "namespace": "shop"})
    paid = register_protected_event("paid", {"group": "order", "namespace": "shop"})
    shipped = register_protected_event("shipped", {"group": "order-fulfilment", "namespace": "warehouse"})

    async def audit(key, order):
        await asyncio.sleep(0.01)
        print(f"Audit: {key.name} -> order #{order['id']}")

    on_group("order*", audit, channel)
    await emit_group_async("order*", {"id": 42}, channel)

    off_group("order*", channel)
    print()

    # Example 3: Dispatch strategies
    print("=" * 60)
    print("Example 3: Dispatch Strategies")
    print("=" * 60)

    channel.on(created, lambda total: total + 10)
    channel.on(paid, lambda total: total * 2)

    async def slow_ship(total):
        await asyncio.sleep(0.05)
        return f"shipped ({total})"

    channel.on(shipped, slow_ship)

    print("parallel: ", await emit_group_with_strategy("order*", "parallel", 5, channel))
    print("series:   ", await emit_group_with_strategy("order*", "series", 5, channel))
    print("waterfall:", await emit_group_with_strategy("order*", "waterfall", 5, channel))


if __name__ == "__main__":
    asyncio.run(main())
