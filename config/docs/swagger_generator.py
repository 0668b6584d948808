from drf_yasg.generators import OpenAPISchemaGenerator

from core.enums import SALE_ID_PATTERN


class MarketplaceSchemaGenerator(OpenAPISchemaGenerator):
    def get_path_parameters(self, path, view_cls):
        parameters = super().get_path_parameters(path, view_cls)

        for parameter in parameters:
            if getattr(parameter, "name", None) == "sale_id":
                parameter.pattern = SALE_ID_PATTERN

        return parameters
