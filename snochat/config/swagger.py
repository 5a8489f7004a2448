""" Swagger configuration defined here... """

# Python Packages
from flask_restx import Api

# Constants
from ..base import constants





# Swagger UI is only served outside production
SWAGGER_DOC_PATH = '/swagger/' if constants.APP_ENV != "production" else False

# Swagger Configuration
api = Api(
    title = constants.SWAGGER_APP_PROPS['name'],
    version = constants.SWAGGER_APP_PROPS['version'],
    description = constants.SWAGGER_APP_PROPS['description'],
    doc = SWAGGER_DOC_PATH,
    catch_all_404s = False
)
