from linkshortener.dao.factory import build_short_link_dao


__all__ = ['build_short_link_dao']
