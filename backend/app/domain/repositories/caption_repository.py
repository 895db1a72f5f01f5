from abc import ABC, abstractmethod


class CaptionRepository(ABC):
    @abstractmethod
    def generate(self, image_data_uri: str, prompt: str) -> str:
        """Return the provider's raw caption text for the image.

        Raises a CaptionGatewayError subclass when the provider is not configured,
        fails, or the input is rejected.
        """
        raise NotImplementedError
