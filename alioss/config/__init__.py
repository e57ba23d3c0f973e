from alioss.config.settings import AliOssSettings, load_settings

__all__ = ["AliOssSettings", "load_settings"]
