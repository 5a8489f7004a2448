"""
Upload Image Request Definition
Handles:
    - user_id (form-data)
    - image (file upload)
"""

# Python Packages
from flask import request as flask_request





class UploadImageRequest:

    @staticmethod
    def apply(namespace):
        """
        Apply swagger decorators to endpoint
        """

        def decorator(func):
            func = namespace.doc(consumes = ['multipart/form-data'])(func)
            func = namespace.param(
                'user_id',
                'User ID',
                _in = 'formData',
                required = True
            )(func)

            func = namespace.param(
                'image',
                'Image (JPG, PNG, GIF, WEBP, max 10 MB)',
                type = 'file',
                _in = 'formData',
                required = True
            )(func)

            return func

        return decorator


    @staticmethod
    def get_data():
        """
        Extract request data; the image is read fully into memory
        """

        image = flask_request.files.get("image")

        return {
            "user_id": flask_request.form.get("user_id"),
            "data": image.read() if image else None,
            "mime_type": image.mimetype if image else None,
            "filename": image.filename if image else None
        }
