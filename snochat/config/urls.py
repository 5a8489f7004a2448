""" Urls of the modules define here... """

# Swagger API...
from ..config.swagger import api

# All Namespaces...
from ..chat.handler import chat_namespace





# Adding the namespaces
class URLs:
    """ All application namespaces will be declare here... """

    _registered = False

    @classmethod
    def add_namespaces(cls):
        """ Function for adding namespaces (once per process)... """

        if cls._registered:
            return

        api.add_namespace(chat_namespace)
        cls._registered = True
