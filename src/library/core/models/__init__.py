from .principal import LibraryPrincipal, TokenClaims

__all__ = ["LibraryPrincipal", "TokenClaims"]
