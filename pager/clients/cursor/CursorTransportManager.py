from pager.helper.HelperConfig import HelperConfig
from pager.clients.cursor.CursorTransportInterface import CursorTransportInterface


class CursorTransportManager:
    """Instantiates the cursor transport for the configured engine."""

    def __init__(self, helper_config: HelperConfig):
        self.helper_config = helper_config
        self.logging = helper_config.get_logger()
        self.transport = self._initialize_transport()

    def _get_engine_from_env(self) -> str:
        """Read the transport engine name from CURSOR_ENGINE.

        Returns:
            str: Capitalised engine name (e.g. "Salesforce").

        Raises:
            ValueError: If CURSOR_ENGINE is not set or empty.
        """
        engine = self.helper_config.get_string_val("CURSOR_ENGINE")
        if not engine:
            raise ValueError("No cursor engine specified in configuration (CURSOR_ENGINE).")
        return engine.strip().lower().capitalize()

    def _initialize_transport(self) -> CursorTransportInterface:
        """Import and instantiate CursorTransport{Engine} from pager.clients.cursor.{engine}.

        Raises:
            ValueError: If the engine is unsupported or cannot be imported.
        """
        engine = self._get_engine_from_env()
        class_name = f"CursorTransport{engine}"
        try:
            module = __import__(
                f"pager.clients.cursor.{engine.lower()}.{class_name}",
                fromlist=[class_name],
            )
            transport_class = getattr(module, class_name)
        except (ImportError, AttributeError) as e:
            raise ValueError("Unsupported cursor engine '%s'. Error: %s" % (engine, e))
        transport = transport_class(helper_config=self.helper_config)
        self.logging.debug("Instantiated cursor transport for engine: %s", engine)
        return transport

    def get_transport(self) -> CursorTransportInterface:
        """Return the instantiated cursor transport."""
        return self.transport
