from playbook.utils.market_session import MarketSession

__all__ = ["MarketSession"]
