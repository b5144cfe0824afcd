# ============================================================================
# STANDARD MSI TABLE MODELS
# ============================================================================
# STATUS: Models - Built-in installer tables
# PURPOSE: Pydantic DAOs for Directory, Component, FeatureComponents, File, Property
# CREATED: 18 OCT 2026
# EXPORTS: Directory, Component, FeatureComponents, File, Property,
#          STANDARD_TABLES, compile_standard_tables
# DEPENDENCIES: pydantic
# ============================================================================
"""
Standard MSI Table Models

DAO models for the core installer tables. Each model is compiled by
SchemaCompiler.compile_model(); the column layout follows the Windows
Installer database reference.

Model Metadata Convention:
    __msi_table__: Table name
    __msi_primary_key__: Key field(s), declared first
    __msi_foreign_keys__: {field: "ReferencedTable"}
"""

from typing import Annotated, ClassVar, Dict, List, Optional

from pydantic import BaseModel, Field

from msi_schema.schema.compiler import CompiledTable, SchemaCompiler
from msi_schema.schema.model_reader import I16, I32, GeneratedIdentifier, Identifier, MsiColumn


class Directory(BaseModel):
    """
    Directory tree of the installation.

    Maps to: Directory table
    """

    __msi_table__: ClassVar[str] = "Directory"
    __msi_primary_key__: ClassVar[List[str]] = ["directory"]
    __msi_foreign_keys__: ClassVar[Dict[str, str]] = {
        "parent_directory": "Directory",
    }

    directory: GeneratedIdentifier = Field(..., max_length=72)
    parent_directory: Optional[
        Annotated[str, MsiColumn(category="Identifier", column_name="Directory_Parent")]
    ] = Field(default=None, max_length=72)
    default_dir: Annotated[str, MsiColumn(category="DefaultDir", localizable=True)] = Field(
        ..., max_length=255
    )


class Component(BaseModel):
    """
    Components of the product; each is installed as a unit.

    Maps to: Component table
    """

    __msi_table__: ClassVar[str] = "Component"
    __msi_primary_key__: ClassVar[List[str]] = ["component"]
    __msi_foreign_keys__: ClassVar[Dict[str, str]] = {
        "directory_": "Directory",
    }

    component: Identifier = Field(..., max_length=72)
    component_id: Optional[
        Annotated[str, MsiColumn(category="GUID", column_name="ComponentId")]
    ] = Field(default=None, max_length=38)
    directory_: Identifier = Field(..., max_length=72)
    attributes: I16 = 0
    condition: Optional[Annotated[str, MsiColumn(category="Condition")]] = Field(
        default=None, max_length=255
    )
    key_path: Optional[Identifier] = Field(default=None, max_length=72)


class FeatureComponents(BaseModel):
    """
    Links features to the components they install. No primary identifier.

    Maps to: FeatureComponents table
    """

    __msi_table__: ClassVar[str] = "FeatureComponents"
    __msi_primary_key__: ClassVar[List[str]] = ["feature_", "component_"]
    __msi_foreign_keys__: ClassVar[Dict[str, str]] = {
        "feature_": "Feature",
        "component_": "Component",
    }

    feature_: Identifier = Field(..., max_length=38)
    component_: Identifier = Field(..., max_length=72)


class File(BaseModel):
    """
    Files installed by each component.

    Maps to: File table
    """

    __msi_table__: ClassVar[str] = "File"
    __msi_primary_key__: ClassVar[List[str]] = ["file"]
    __msi_foreign_keys__: ClassVar[Dict[str, str]] = {
        "component_": "Component",
    }

    file: Identifier = Field(..., max_length=72)
    component_: Identifier = Field(..., max_length=72)
    file_name: Annotated[str, MsiColumn(category="Filename", localizable=True)] = Field(
        ..., max_length=255
    )
    file_size: I32
    version: Optional[Annotated[str, MsiColumn(category="Version")]] = Field(
        default=None, max_length=72
    )
    language: Optional[Annotated[str, MsiColumn(category="Language")]] = Field(
        default=None, max_length=20
    )
    attributes: Optional[I16] = None
    sequence: I32


class Property(BaseModel):
    """
    Global properties of the installation.

    Maps to: Property table
    """

    __msi_table__: ClassVar[str] = "Property"
    __msi_primary_key__: ClassVar[List[str]] = ["property"]

    property: Identifier = Field(..., max_length=72)
    value: Annotated[str, MsiColumn(localizable=True)] = Field(..., max_length=255)


STANDARD_TABLES = (Directory, Component, FeatureComponents, File, Property)


def compile_standard_tables(compiler: Optional[SchemaCompiler] = None) -> Dict[str, CompiledTable]:
    """
    Compile every standard table model.

    Returns:
        Dict of table name -> CompiledTable
    """
    compiler = compiler or SchemaCompiler()
    return compiler.compile_all(STANDARD_TABLES)


__all__ = [
    "Directory",
    "Component",
    "FeatureComponents",
    "File",
    "Property",
    "STANDARD_TABLES",
    "compile_standard_tables",
]
