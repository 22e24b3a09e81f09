"""
String Helper Functions
Laravel-style name conversions used by the generators
"""
import re


class Str:
    """
    String manipulation helper class (Laravel-style)

    - snake_case conversion (module and file names)
    - StudlyCase conversion (class names)
    """

    @staticmethod
    def snake(value: str, delimiter: str = '_') -> str:
        """
        Convert a string to snake_case

        Example:
            Str.snake('BlogPost')   # 'blog_post'
            Str.snake('blog-post')  # 'blog_post'
            Str.snake('blogPost')   # 'blog_post'
        """
        if not value:
            return value

        value = re.sub(r'[\s\-]+', delimiter, value)

        # Insert delimiter before uppercase letters
        value = re.sub('(.)([A-Z][a-z]+)', r'\1' + delimiter + r'\2', value)
        value = re.sub('([a-z0-9])([A-Z])', r'\1' + delimiter + r'\2', value)

        value = value.lower()
        value = re.sub(f'{re.escape(delimiter)}+', delimiter, value)

        return value.strip(delimiter)

    @staticmethod
    def studly(value: str) -> str:
        """
        Convert a string to StudlyCase (PascalCase)

        Already-studly words keep their inner capitals.

        Example:
            Str.studly('blog_post')  # 'BlogPost'
            Str.studly('BlogPost')   # 'BlogPost'
        """
        if not value:
            return value

        words = value.replace('_', ' ').replace('-', ' ').split()
        return ''.join(word[0].upper() + word[1:] for word in words)
