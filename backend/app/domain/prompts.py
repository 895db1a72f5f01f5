DEFAULT_CAPTION_PROMPT = (
    "Generate a creative and engaging caption for this image, perfect for WhatsApp or social media. "
    "Make it fun, descriptive, and shareable!"
)
