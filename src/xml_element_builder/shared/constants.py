"""Namespace URIs reserved by the XML Namespaces recommendation."""

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"
XMLNS_NAMESPACE = "http://www.w3.org/2000/xmlns/"

XML_PREFIX = "xml"
XMLNS_PREFIX = "xmlns"

# Seed bindings of every builder's persistent prefix table (namespace -> prefix)
RESERVED_PREFIXES = {
    XML_NAMESPACE: XML_PREFIX,
    XMLNS_NAMESPACE: XMLNS_PREFIX,
}
