"""Pipeline stage agents and prompt builders."""
