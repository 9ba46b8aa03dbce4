"""Abstract base class for ShortLink data access objects (DAOs).

This class establishes a consistent contract for all ShortLink DAO implementations,
regardless of the underlying storage mechanism (e.g., Redis, in-process memory).

Responsibilities:
    - Provide an interface for inserting, retrieving and deleting ShortLinkModel objects.
    - Own shortcode uniqueness: insert() is the only uniqueness gate.
    - Keep click_count and click_history consistent under concurrent clicks.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from linkshortener.models import ShortLinkModel, ClickEventModel
        >>> from linkshortener.dao.redis import ShortLinkRedisDAO

        >>> dao = ShortLinkRedisDAO(...)

        >>> short_link = dao.insert(ShortLinkModel(
        ...     original_url="https://example.com/blog/article-123",
        ...     shortcode="a1b2c3",
        ... ))
        >>> dao.hit("a1b2c3", ClickEventModel(user_agent="curl/8.4.0"))
        1

        >>> retrieved = dao.get("a1b2c3")
        >>> retrieved.click_count
        1
"""

from abc import ABC, abstractmethod

from linkshortener.models import ShortLinkModel, ClickEventModel


class ShortLinkBaseDAO(ABC):
    """Interface for ShortLink data access objects (DAOs).

    Methods:
        insert(short_link: ShortLinkModel, **kwargs) -> ShortLinkModel:
            Atomically insert a new link, assigning its id and timestamps.
            Raises ShortLinkAlreadyExistsError if the shortcode is taken.

        get(shortcode: str, **kwargs) -> ShortLinkModel | None:
            Retrieve a link by shortcode. Returns None if absent.

        get_by_id(link_id: str, **kwargs) -> ShortLinkModel | None:
            Retrieve a link by id. Returns None if absent.

        list_by_owner(owner_id: str, **kwargs) -> list[ShortLinkModel]:
            Retrieve all links of an owner, newest first.

        hit(shortcode: str, click: ClickEventModel, **kwargs) -> int:
            Atomically increment the click counter and append the click event.
            Raises ShortLinkNotFoundError if the shortcode doesn't exist.

        record_click(short_link: ShortLinkModel, click: ClickEventModel, **kwargs) -> ShortLinkModel:
            Persist a click against an already loaded link (single atomic write).

        set_active(link_id: str, active: bool, **kwargs) -> ShortLinkModel:
            Flip the link's active flag. Raises ShortLinkNotFoundError.

        delete(link_id: str, **kwargs) -> None:
            Remove the link and free its shortcode. Raises ShortLinkNotFoundError.

    All methods raise DataStoreError on connection, timeout or write failures.

    Subclassing:
        Datastore-specific implementations (e.g., ShortLinkRedisDAO or
        ShortLinkMemoryDAO) must extend this class and implement all
        abstract methods.
    """

    @abstractmethod
    def insert(self, short_link: ShortLinkModel, **kwargs) -> ShortLinkModel:
        """Insert a new ShortLinkModel into the data store.

        The insert is the single source of truth for shortcode uniqueness: two
        concurrent inserts of the same shortcode must result in exactly one
        success and one ShortLinkAlreadyExistsError.

        Args:
            short_link (ShortLinkModel):
                The link to insert. Its id/created_at/updated_at are ignored.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortLinkModel: the stored link, with id and timestamps assigned.

        Raises:
            ShortLinkAlreadyExistsError:
                If a link with the same shortcode already exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> ShortLinkModel | None:
        """Retrieve a ShortLinkModel (with its click history) by shortcode."""
        pass

    @abstractmethod
    def get_by_id(self, link_id: str, **kwargs) -> ShortLinkModel | None:
        """Retrieve a ShortLinkModel (with its click history) by id."""
        pass

    @abstractmethod
    def list_by_owner(self, owner_id: str, **kwargs) -> list[ShortLinkModel]:
        """Retrieve every link created by owner_id, ordered by created_at descending."""
        pass

    @abstractmethod
    def hit(self, shortcode: str, click: ClickEventModel, **kwargs) -> int:
        """Record a click against a shortcode without loading the link.

        Increment and append happen as one atomic operation; implementations must
        never read the counter, add one and write it back.

        Args:
            shortcode (str):
                Shortcode of the clicked link.

            click (ClickEventModel):
                Click event to append to the link's history.

        Returns:
            int: the click count after this click.

        Raises:
            ShortLinkNotFoundError:
                If no link with the given shortcode exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def record_click(self, short_link: ShortLinkModel, click: ClickEventModel, **kwargs) -> ShortLinkModel:
        """Record a click against an already loaded link.

        The loaded model is updated in place (counter and history) with the
        store's authoritative count, and the change is persisted in one atomic write.

        Raises:
            ShortLinkNotFoundError:
                If the link was deleted since it was loaded.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def set_active(self, link_id: str, active: bool, **kwargs) -> ShortLinkModel:
        """Set the link's is_active flag and return the updated link."""
        pass

    @abstractmethod
    def delete(self, link_id: str, **kwargs) -> None:
        """Delete the link, its click history and its shortcode reservation."""
        pass
