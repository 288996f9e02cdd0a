from coffeeshop.config.settings import Config, TestConfig

__all__ = ["Config", "TestConfig"]
